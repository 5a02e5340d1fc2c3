import re

# Category ceilings
SECURITY_MAX = 40
DOCUMENTATION_MAX = 20
CODE_QUALITY_MAX = 20
MAINTENANCE_MAX = 20
OVERALL_MAX = SECURITY_MAX + DOCUMENTATION_MAX + CODE_QUALITY_MAX + MAINTENANCE_MAX

# Grade thresholds (inclusive lower bounds)
GRADE_THRESHOLDS = [
    ("A", 90),
    ("B", 80),
    ("C", 70),
    ("D", 60),
]
PASSING_GRADES = {"A", "B", "C"}

# Reputation lookup
REPUTATION_DEFAULT_ENDPOINT = "https://clawdex.koi.security/api/skill/"
REPUTATION_DEFAULT_TIMEOUT = 10.0  # seconds
REPUTATION_MAX = 20
REPUTATION_SCORE_BENIGN = 20
REPUTATION_SCORE_UNKNOWN = 10
REPUTATION_SCORE_MALICIOUS = 0
REPUTATION_SCORE_ERROR = 10

# Static scanner
SCANNER_DEFAULT_PATH = "skill-scanner"
SCANNER_DEFAULT_TIMEOUT = 120.0  # seconds
SCANNER_MAX_OUTPUT_BYTES = 10 * 1024 * 1024  # 10MB
SCANNER_STDERR_KEEP_BYTES = 64 * 1024
SCANNER_READ_CHUNK_BYTES = 64 * 1024
SCANNER_KILL_GRACE_SECONDS = 5.0
SCANNER_MAX = 20
SCANNER_UNAVAILABLE_SCORE = 10
SCANNER_PARSE_ERROR_SCORE = 15
PENALTY_CRITICAL = 10
PENALTY_HIGH = 5
PENALTY_MEDIUM = 2
PENALTY_LOW = 1

# Documentation
PRIMARY_DOC_FILE = "SKILL.md"
SECONDARY_DOC_FILE = "README.md"
PRIMARY_DOC_MIN_LENGTH = 500
SECONDARY_DOC_MIN_LENGTH = 300
PRIMARY_DOC_POINTS = 10
SECONDARY_DOC_POINTS = 5
EXAMPLES_POINTS = 3
REFERENCES_POINTS = 2

EXAMPLES_PATTERNS = [
    re.compile(r"##\s*examples?", re.IGNORECASE),
    re.compile(r"##\s*usage", re.IGNORECASE),
    re.compile(r"##\s*how\s+to\s+use", re.IGNORECASE),
    re.compile(r"```"),  # code blocks usually are examples
]
REFERENCES_PATTERNS = [
    re.compile(r"##\s*references?", re.IGNORECASE),
    re.compile(r"##\s*links?", re.IGNORECASE),
    re.compile(r"##\s*see\s+also", re.IGNORECASE),
    re.compile(r"##\s*resources?", re.IGNORECASE),
]

# Code quality
CODE_EXTENSIONS = {".js", ".mjs", ".cjs", ".ts", ".sh", ".py", ".md"}
DOC_EXTENSIONS = {".md"}
SKIPPED_DIRECTORIES = {
    "node_modules",
    ".git",
    ".vscode",
    ".idea",
    "dist",
    "build",
    "__pycache__",
    ".venv",
    "venv",
}
NO_SECRETS_POINTS = 10
ERROR_HANDLING_POINTS = 5
COMMENTS_POINTS = 3
NAMING_POINTS = 2
ERROR_HANDLING_MIN_RATIO = 30  # percent of analyzed files
COMMENT_DENSITY_MIN = 10  # percent of lines
NAMING_MIN_RATIO = 50  # percent of analyzed files
SECRET_SAMPLE_LIMIT = 3

SECRET_PATTERNS = [
    re.compile(
        r"(?:api[_-]?key|apikey|access[_-]?token|auth[_-]?token|secret[_-]?key)"
        r"\s*[=:]\s*['\"][a-zA-Z0-9_-]{20,}['\"]",
        re.IGNORECASE,
    ),
    re.compile(r"sk-[a-zA-Z0-9]{32,}"),  # OpenAI-style keys
    re.compile(r"ghp_[a-zA-Z0-9]{36}"),  # GitHub tokens
    re.compile(r"xox[baprs]-[a-zA-Z0-9-]+"),  # Slack tokens
]
ERROR_HANDLING_PATTERNS = [
    re.compile(r"try\s*{"),
    re.compile(r"catch\s*\("),
    re.compile(r"\.catch\("),
    re.compile(r"if\s*\([^)]*error", re.IGNORECASE),
    re.compile(r"throw\s+new\s+Error"),
    re.compile(r"^\s*try\s*:", re.MULTILINE),
    re.compile(r"^\s*except\b", re.MULTILINE),
    re.compile(r"^\s*raise\s+\w+", re.MULTILINE),
    re.compile(r"^\s*set\s+-e", re.MULTILINE),
    re.compile(r"\|\|\s*exit\b"),
]
COMMENT_PREFIXES = ("//", "/*", "*", "#")

# Maintenance
GIT_DIRECTORY = ".git"
GIT_DEFAULT_TIMEOUT = 30.0  # seconds
RECENCY_WINDOW_DAYS = 180  # 6 months
GIT_POINTS = 5
RECENT_COMMIT_POINTS = 10
VERSION_POINTS = 5
CHANGELOG_FILES = ["CHANGELOG.md", "CHANGELOG", "HISTORY.md", "RELEASES.md"]
VERSION_FILE = "VERSION"

# Recommendations
CRITICAL_MARKER = "⚠️"

# Environment overrides for ScorecardConfig.from_env()
ENV_REPUTATION_ENDPOINT = "SCORECARD_REPUTATION_ENDPOINT"
ENV_REPUTATION_TIMEOUT = "SCORECARD_REPUTATION_TIMEOUT"
ENV_SCANNER_PATH = "SCORECARD_SCANNER_PATH"
ENV_SCANNER_TIMEOUT = "SCORECARD_SCANNER_TIMEOUT"
