"""
Version lookup for the wastesim distribution; the rest of the metadata lives
in pyproject.toml.
"""
import re
import subprocess
from pathlib import Path
from setuptools import setup

INIT_FILE = Path(__file__).parent / "src" / "wastesim" / "__init__.py"


def get_version() -> str:
    """get the last version tag from git, with fallback to __init__.py

    Returns:
        str: version in PEP 440 format
    """
    try:
        result = subprocess.run(
            ["git", "describe", "--tags"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=5
        )
        version_tag = result.stdout.decode("utf-8").strip()

        # "v1.2.0-14-g4f69b64" becomes "1.2.0.post14"
        match = re.match(r'v?(\d+\.\d+\.\d+)(?:-(\d+)-g[a-f0-9]+)?', version_tag)
        if match:
            base_version, commits_since = match.groups()
            return f"{base_version}.post{commits_since}" if commits_since else base_version
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass

    match = re.search(r'__version__\s*=\s*["\']([^"\']+)["\']', INIT_FILE.read_text())
    if match:
        return match.group(1)
    return "1.0.0"


setup(version=get_version())
