"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INVALID_VERSION = 2
    DIRTY_WORKING_TREE = 3
    VCS_ERROR = 4
    CONFIG_ERROR = 5


class PackageCategories(Enum):
    """Categories of internal packages in the release set.

    Args:
        Enum (string): Category names as used in configuration files.
    """

    ADAPTERS = "adapters"
    RUNTIMES = "runtimes"
    CORE = "core"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    PACKAGES_DIR = "packages"
    SCRIPTS_DIR = "scripts"
    ORG_SCOPE = "@remix-run"
    DIRECTORY_PREFIX = "remix-"
    CDN_BASE_URL = "https://esm.sh"

    # Primary library and its project-scaffolding tool
    STANDALONE_PACKAGES = ["remix", "create-remix"]
    # Extra standalone tool appended last to the membership set
    STANDALONE_TOOL = "serve"

    DEFAULT_ADAPTERS = ["architect", "cloudflare-pages", "cloudflare-workers", "express"]
    DEFAULT_RUNTIMES = ["cloudflare", "deno", "node"]
    DEFAULT_CORE = [
        "dev",
        "server-runtime",
        "react",
        "eslint-config",
        "css-bundle",
        "testing",
    ]

    IMPORT_MAPS = [
        ".vscode/deno_resolve_npm_imports.json",
        "templates/classic-remix-compiler/deno/.vscode/resolve_npm_imports.json",
    ]
    # The Deno runtime must keep resolving to its local source, never the CDN
    IMPORT_MAP_EXCLUSIONS = ["@remix-run/deno"]

    DEPLOYMENT_PACKAGE = "deployment-test"
    DEPLOYMENT_DEPENDENCY = "dev"

    JSON_INDENT = 2

    COMMIT_MESSAGE_TEMPLATE = "Version {version}"
    TAG_TEMPLATE = "v{version}"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "REMIX_RELEASE_LOG_LEVEL"
    GIT_EXECUTABLE = "git"
