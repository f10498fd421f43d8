import os

LOG_LEVEL = (os.getenv("INSTALLMENTS_LOG_LEVEL") or "INFO").upper()
API_TITLE = os.getenv("INSTALLMENTS_API_TITLE") or "installment-normalizer"
API_VERSION = "0.1.0"
