# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "path": "pathvalue.io.path",
    "posix": "pathvalue.io.posix",
    "fs": "pathvalue.io.fs",
    "dirs": "pathvalue.io.dirs",
    "io": "pathvalue.io",
    "conf": "pathvalue.config",
    "cli": "pathvalue.cli",
}

# Top-level modules within pathvalue for auto-prefixing
KNOWN_TOP_MODULES = {
    "io",
    "utils",
    "config",
    "cli",
    "exceptions",
}

LOG_LEVELS_ENV = "PATHVALUE_LOG_LEVELS"


# --- Path syntax ---
SEP = "/"
CURRENT_DIR = "."
PARENT_DIR = ".."
EXT_MARK = "."

FILE_SCHEME = "file"
FILE_URL_PREFIX = "file://"
LOCAL_HOSTS = ("", "localhost")


# --- Path kinds used by existence checks ---
KIND_FILE = "file"
KIND_DIRECTORY = "directory"
PATH_KINDS = (KIND_FILE, KIND_DIRECTORY)


# --- Settings ---
DEFAULT_TEMP_PREFIX = "pathvalue-"
DEFAULT_ENCODING = "utf-8"
DEFAULT_JSON_INDENT = 2

# settings field -> environment variable
SETTINGS_ENV_VARS = {
    "temp_prefix": "PATHVALUE_TEMP_PREFIX",
    "encoding": "PATHVALUE_ENCODING",
    "json_indent": "PATHVALUE_JSON_INDENT",
}


# --- XDG Base Directories ---
# name -> (environment variable, home-relative default)
XDG_DIRS = {
    "cache": ("XDG_CACHE_HOME", ".cache"),
    "config": ("XDG_CONFIG_HOME", ".config"),
    "data": ("XDG_DATA_HOME", ".local/share"),
    "state": ("XDG_STATE_HOME", ".local/state"),
}


# --- Structured data ---
FORMAT_JSON = "json"
FORMAT_YAML = "yaml"
STRUCTURED_FORMATS = (FORMAT_JSON, FORMAT_YAML)
# extension -> format, anything else is JSON
FORMAT_BY_EXTENSION = {
    ".json": FORMAT_JSON,
    ".yml": FORMAT_YAML,
    ".yaml": FORMAT_YAML,
}


# --- Filesystem backends ---
MEMORY_TEMP_ROOT = "/tmp"
MEMORY_TRASH_DIR = "/.Trash"
TEMP_TOKEN_LENGTH = 6
