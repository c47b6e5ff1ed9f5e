"""polyscript core - configuration management and package information.

## Key Modules

### Configuration (`polyscript.core.config`)
- `RuntimeConfigModel`: context keys, logging and telemetry settings
- `load_runtime_config()`: load and validate a YAML configuration file

### Version (`polyscript.core.version`)
- `PACKAGE_NAME`: The package name ("polyscript")
- `PACKAGE_VERSION`: The installed package version
- `get_package_info()`: Get both name and version as a tuple
"""

from .version import PACKAGE_NAME, PACKAGE_VERSION, get_package_info

__all__ = ["PACKAGE_NAME", "PACKAGE_VERSION", "get_package_info"]
