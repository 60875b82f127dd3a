from pathlib import Path
from setuptools import find_packages, setup


def _read_version() -> str:
    """Read __version__ from the package without importing it."""
    init = Path(__file__).parent / "src" / "ctxreplace" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    return "0.0.0"


setup(
    name="ctxreplace",
    version=_read_version(),
    description="Context-aware block replacement: delimiters, escapes, scopes and comments",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["ctxreplace=ctxreplace.cli:main"]},
)
