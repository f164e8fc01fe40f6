from .purchase import PurchaseRecord
from .sales import SaleRecord
