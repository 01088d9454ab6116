PROJECT_NAME = "Meridian"
API_V1_STR = "/api/v1"
ISSUES_API_PREFIX = "/issues-api"
