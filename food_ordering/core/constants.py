# ------------------------
# AWS S3 Folders
# ------------------------
S3_FOLDER_RESTAURANTS = "restaurants"
S3_FOLDER_MENUS = "menus"
S3_FOLDER_PROFILE_PICS = "profile_pictures"

# ------------------------
# Images
# ------------------------
ALLOWED_IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}

# ------------------------
# Auth
# ------------------------
VERIFICATION_CODE_TTL_HOURS = 24
RESET_TOKEN_MAX_AGE_SECONDS = 60 * 60
RESET_TOKEN_SALT = "password-reset"
