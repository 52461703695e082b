PROJECT_NAME = "LANMIC Site API"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"
REFRESH_TOKEN_HEADER = "x-refresh-token"

UPLOADS_URL_PATH = "/uploads"
