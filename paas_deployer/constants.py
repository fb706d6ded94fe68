# ==========================================
# 1. Naming
# ==========================================
ARCHIVE_PREFIX = "heaven"
ARCHIVE_EXTENSION = ".zip"
VERSION_LABEL_PREFIX = "heaven"

# Legacy packaging token returned by the archive-link API and its zip twin
LEGACY_TARBALL_TOKEN = "legacy.tar.gz"
LEGACY_ZIP_TOKEN = "legacy.zip"

# ==========================================
# 2. AWS
# ==========================================
DEFAULT_AWS_REGION = "us-east-1"
BEANSTALK_CONSOLE_URL = "https://console.aws.amazon.com/elasticbeanstalk/home"
BEANSTALK_DISPLAY_NAME = "Beanstalk"
BEANSTALK_PROVIDER_NAME = "elastic_beanstalk"

AWS_CONNECT_TIMEOUT_SECONDS = 10
AWS_READ_TIMEOUT_SECONDS = 60

# ==========================================
# 3. Source Control
# ==========================================
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# ==========================================
# 4. Runtime
# ==========================================
DEFAULT_WORKING_DIRECTORY = "/tmp/paas-deployer"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30
