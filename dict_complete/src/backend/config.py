MIN_WORD_TRIGGER_LENGTH: int = 3
MIN_WORD_LENGTH: int = 2
MAX_LOOK_BACK_DISTANCE: int = 50

# Body of a regex character class; words are maximal runs of these characters
CHARACTER_REGEX: str = "a-zA-ZöäüÖÄÜß"

# One of the WordInsertionMode display values
WORD_INSERTION_MODE: str = "Ignore-Case & Replace"
IGNORE_DIACRITICS: bool = False

# Provider switches
FILE_SCANNER_ENABLED: bool = True
FILE_SCANNER_SCAN_CURRENT: bool = True
WORD_LIST_ENABLED: bool = True
FRONT_MATTER_ENABLED: bool = True
# insertion text of a front matter tag gets FRONT_MATTER_TAG_SUFFIX appended
FRONT_MATTER_TAG_APPEND_SUFFIX: bool = True
FRONT_MATTER_TAG_SUFFIX: str = ", "

# Enter always accepts a suggestion in the editor; Tab only when enabled
TAB_INSERTS_COMPLETION: bool = False

# /* ~~~ file scanning ~~~ */
SCAN_EXTS = [".md", ".txt"]
WORDLIST_EXTS = [".txt"]
FRONT_MATTER_EXTS = [".md"]
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", ".obsidian", "node_modules", "__pycache__"}

# /* ~~~ API: cap how many suggestions one response carries ~~~ */
TOP_K: int = 20
MAX_TOP_K: int = 200

DEFAULT_DSN = "memory://"
