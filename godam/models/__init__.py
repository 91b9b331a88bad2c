# godam/models/__init__.py
from .account import Account, AccountTransaction, AccountType, TransactionType
from .feriwala import FeriwalaRecord, FeriwalaScrap
from .kabadiwala import KabadiwalaRecord, KabadiwalaScrap
from .maal_out import MaalOut, MaalOutItem
from .maal_in import MaalIn, MaalInItem, MaalInPayment, MaalInStatus, PaymentStatus
from .labour import Labour, LabourSalarySummary, Attendance, LabourSalary, LabourWithdrawal
from .stock import GodownStock
