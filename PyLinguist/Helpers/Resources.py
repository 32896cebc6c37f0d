import os
import sys
import appdirs # type: ignore

# Per-user folder for logs and default configuration
config_dir : str = appdirs.user_config_dir("llm-tstrans", appauthor=False, roaming=True)

# Folder containing the PyLinguist package, or the unpacked bundle when frozen
package_dir : str = getattr(sys, '_MEIPASS', os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

def GetResourcePath(relative_path : str, *parts : str) -> str:
    """
    Resolve a path to a bundled resource such as the locales folder.
    """
    return os.path.join(package_dir, relative_path or "", *parts)
