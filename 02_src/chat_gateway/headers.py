"""
HTTP header names exchanged with the live-chat service.
"""

AUTH_CODE_NONCE = "AuthCodeNonce"
OC_SESSION_ID = "Oc-Sessionid"
AUTHENTICATED_USER_TOKEN = "AuthenticatedUserToken"
AUTHORIZATION = "Authorization"
REQUEST_ID = "RequestId"
CORRELATION_ID = "Correlation-Id"
ORGANIZATION_ID = "OrganizationId"
WIDGET_APP_ID = "WidgetAppId"
OC_USER_AGENT = "OC-User-Agent"
CUSTOMER_DISPLAY_NAME = "customerDisplayName"

# Response-only headers
TRANSACTION_ID = "transactionid"
ERROR_CODE = "errorcode"
