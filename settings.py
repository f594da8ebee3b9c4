from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 8080)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "127.0.0.1")

# Google OAuth client registration (required for login; checked lazily)
GOOGLE_CLIENT_ID = config.get_optional("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = config.get_optional("GOOGLE_CLIENT_SECRET")
GOOGLE_REDIRECT_URI = config.get_optional("GOOGLE_REDIRECT_URI")

# Google endpoints (hardcoded defaults, overridable for testing against a stub)
GOOGLE_AUTH_BASE = config.get("GOOGLE_AUTH_BASE", "https://accounts.google.com/o/oauth2/v2/auth")
GOOGLE_TOKEN_URL = config.get("GOOGLE_TOKEN_URL", "https://oauth2.googleapis.com/token")
GMAIL_API_BASE = config.get("GMAIL_API_BASE", "https://gmail.googleapis.com/gmail/v1/users/me")

# Mailbox listing (single page only)
GMAIL_LIST_MAX_RESULTS = config.get("GMAIL_LIST_MAX_RESULTS", 25)
GMAIL_LIST_LABEL = config.get("GMAIL_LIST_LABEL", "INBOX")

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for token and mailbox requests
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# Cookie lifetimes (seconds)
SESSION_COOKIE_MAX_AGE = config.get("SESSION_COOKIE_MAX_AGE", 60 * 60 * 24)
OAUTH_COOKIE_MAX_AGE = config.get("OAUTH_COOKIE_MAX_AGE", 600)
# Only set Secure when served over https, otherwise browsers drop the cookies
COOKIE_SECURE = config.get("COOKIE_SECURE", False)
