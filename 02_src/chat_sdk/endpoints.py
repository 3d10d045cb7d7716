"""
Endpoint paths of the live-chat service.
"""

LIVE_CHAT_CONNECTOR = "livechatconnector"
LIVE_CHAT_CONNECTOR_AUTH = "livechatconnector/auth"

LCW_FCS_DETAILS = "livechatconnector/lcwfcsdetails"
CONFIG = "livechatconnector/config"

LWI_DETAILS = "livechatconnector/lwicontext"
AUTH_LWI_DETAILS = "livechatconnector/auth/lwicontext"

GET_CHAT_TOKEN = "livechatconnector/getchattoken"
AUTH_GET_CHAT_TOKEN = "livechatconnector/auth/getchattoken"
V2_GET_CHAT_TOKEN = "livechatconnector/v2/getchattoken"
V2_AUTH_GET_CHAT_TOKEN = "livechatconnector/v2/auth/getchattoken"
V2_MULTI_BOT_GET_CHAT_TOKEN = "livechatconnector/v2/multibot/getchattoken"
V2_MULTI_BOT_AUTH_GET_CHAT_TOKEN = "livechatconnector/v2/multibot/auth/getchattoken"

RECONNECTABLE_CHATS = "livechatconnector/auth/reconnectablechats"
RECONNECT_AVAILABILITY = "livechatconnector/reconnectavailability"
AGENT_AVAILABILITY = "livechatconnector/v2/agentavailability"

SESSION_INIT = "livechatconnector/sessioninit"
AUTH_SESSION_INIT = "livechatconnector/auth/sessioninit"

SESSION_CLOSE = "livechatconnector/sessionclose"
AUTH_SESSION_CLOSE = "livechatconnector/auth/sessionclose"

VALIDATE_AUTH_CHAT_MAP_RECORD = "livechatconnector/auth/validateauthchatmaprecord"

SUBMIT_POST_CHAT = "livechatconnector/postchatsurvey"
AUTH_SUBMIT_POST_CHAT = "livechatconnector/auth/postchatsurvey"

SURVEY_INVITE_LINK = "livechatconnector/surveyinvitelink"
AUTH_SURVEY_INVITE_LINK = "livechatconnector/auth/surveyinvitelink"

TRANSCRIPT = "livechatconnector/transcript"
AUTH_TRANSCRIPT = "livechatconnector/auth/transcript"
V2_TRANSCRIPT = "livechatconnector/v2/transcript"
V2_AUTH_TRANSCRIPT = "livechatconnector/v2/auth/transcript"

EMAIL_TRANSCRIPT = "livechatconnector/createemailrequest"
AUTH_EMAIL_TRANSCRIPT = "livechatconnector/auth/createemailrequest"

DATA_MASKING_INFO = "livechatconnector/datamaskinginfo"

SECONDARY_CHANNEL_EVENT = "livechatconnector/secondarychannelevent"
AUTH_SECONDARY_CHANNEL_EVENT = "livechatconnector/auth/secondarychannelevent"

TYPING_INDICATOR = "livechatconnector/typingindicator"


def chat_token_endpoint(live_chat_version: int, authenticated: bool, multi_bot: bool) -> str:
    """
    Pick the chat token endpoint for the protocol version and caller kind.

    Args:
        live_chat_version: 1 or 2
        authenticated: Caller presents an authenticated user token
        multi_bot: A bot application id was supplied (v2 only)
    """
    if live_chat_version == 2:
        if multi_bot:
            return V2_MULTI_BOT_AUTH_GET_CHAT_TOKEN if authenticated else V2_MULTI_BOT_GET_CHAT_TOKEN
        return V2_AUTH_GET_CHAT_TOKEN if authenticated else V2_GET_CHAT_TOKEN
    return AUTH_GET_CHAT_TOKEN if authenticated else GET_CHAT_TOKEN
