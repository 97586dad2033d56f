import os
from pathlib import Path

# ==============================================================================
# PROJECT PATHS
# ==============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# Directories
RESOURCES_DIR = BASE_DIR / "resources"
XSLT_DIR_NAME = "xslt"

# Essential Files
XSD_SCHEMA_FILE_NAME = "github-actions-schema.xsd"
XSLT_FILE_NAME = "github-actions-transform.xslt"

DEFAULT_XSD_SCHEMA_FILE = Path(
    os.environ.get("NMYAML_XSD_SCHEMA", RESOURCES_DIR / XSD_SCHEMA_FILE_NAME)
)
DEFAULT_XSLT_FILE = Path(
    os.environ.get("NMYAML_XSLT", RESOURCES_DIR / XSLT_FILE_NAME)
)

# Searched in order when no stylesheet is given on the command line
XSLT_SEARCH_PATHS = [
    DEFAULT_XSLT_FILE,
    BASE_DIR / XSLT_FILE_NAME,
    BASE_DIR / XSLT_DIR_NAME / XSLT_FILE_NAME,
    Path.cwd() / XSLT_DIR_NAME / XSLT_FILE_NAME,
    Path.cwd() / XSLT_FILE_NAME,
]

# ==============================================================================
# FILE TYPES
# ==============================================================================
SUPPORTED_XML_EXTENSIONS = {".xml"}
SUPPORTED_YAML_EXTENSIONS = {".yml", ".yaml"}

# ==============================================================================
# OUTPUT SETTINGS
# ==============================================================================
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
BACKUP_EXTENSION = ".bak"
REPORT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
REPORT_FILE_PATTERN = "validation-report-{timestamp}.json"
DEFAULT_INDENT = 2
OUTPUT_ENCODING = "utf-8"

CONSOLE_WIDTH = 80
