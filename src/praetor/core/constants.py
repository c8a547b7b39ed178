"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOKEN_EXPIRE_DAYS = 7
DEFAULT_PROJECT_COLOR = "#3b82f6"
DEFAULT_CURRENCY = "USD"
DEFAULT_DAILY_GOAL = 8
DEFAULT_PAYMENT_TERMS = "immediate"
DEFAULT_QUOTE_STATUS = "quoted"
DEFAULT_SALE_STATUS = "pending"
GENERAL_SETTINGS_ID = 1
LDAP_CONFIG_ID = 1
