from __future__ import annotations

from pathlib import Path
from setuptools import find_packages, setup

BASE_DIR = Path(__file__).parent
README = (BASE_DIR / "readme.md").read_text(encoding="utf-8") if (BASE_DIR / "readme.md").exists() else ""

setup(
    name="bunk-calculator",
    version="0.1.0",
    description="Desktop attendance bunk calculator built with CustomTkinter.",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "customtkinter>=5.2.0",
        "loguru>=0.7.0",
        "matplotlib>=3.7.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pyinstaller>=5.13.0",
        ]
    },
    entry_points={
        "gui_scripts": [
            "bunk-calculator=bunk_calculator.main:main",
        ]
    },
)
