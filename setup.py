"""Setup configuration for cycletime"""

from setuptools import setup, find_packages

setup(
    name="pr-cycle-time-metrics",
    version="0.1.0",
    description=(
        "CLI tool for GitHub pull request cycle-time metrics: time to first "
        "review, rework, waiting to deploy and cycle time in business days."
    ),
    author="PR Cycle-Time Metrics Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.24",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "pr-cycle-time=cycletime.main:main",
        ],
    },
)
