from pathlib import Path

# Schema shipped with the package
SCHEMA_ID = "org.gnome.shell.extensions.shutdowntimer"
SCHEMA_DIR = Path(__file__).parent / "schemas"

# System-wide schema directories searched after the bundled one
SYSTEM_SCHEMA_DIRS = (
    Path("/usr/local/share/shutdowntimer/schemas"),
    Path("/usr/share/shutdowntimer/schemas"),
)

# Persisted values
DEFAULT_STORE_PATH = Path("~/.config/shutdowntimer/settings.yaml").expanduser()

# Environment overrides
CONFIG_ENV_VAR = "SHUTDOWNTIMER_CONFIG"
SCHEMA_DIRS_ENV_VAR = "SHUTDOWNTIMER_SCHEMA_DIRS"
