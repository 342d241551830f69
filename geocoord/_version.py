"""Package version: installed metadata, or the repo-root VERSION file in a source checkout"""

__all__ = ['__version__']

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

try:
    __version__ = version('geocoord')
except PackageNotFoundError:
    __version__ = (Path(__file__).resolve().parents[1] / 'VERSION').read_text(encoding='utf-8').strip()
