PACKAGE = "schooldesk"
SITE_NAME = "School Dashboard"

LANGUAGES = {
    "en": "English",
    "fr_FR": "French",
}

# Toast durations are in milliseconds, matching the browser client
DEFAULT_TOAST_DURATION = 3000
