"""
Setup script for civics-coach.

Civics coach is the progress-tracking core of a civics test study app.
It serves three roles:

1. Progress Ledger - Per-question attempt history and mastery labels
2. Session Engine - Randomized practice and exam simulations
3. Answer Resolver - Current office holders kept out of catalog data

The presentation layer (web, desktop or terminal) imports the 'civics'
package and drives it through a single StudyContext.
"""

from setuptools import find_packages, setup

setup(
    name="civics-coach",
    version="1.0.0",
    description="Progress tracking and practice sessions for the civics test",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Civics Coach",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        # Config & Validation
        "pydantic>=2.5.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="civics citizenship quiz education progress",
)
