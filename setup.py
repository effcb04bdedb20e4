# setup.py
from setuptools import setup, find_packages

setup(
    name="payday-ledger",
    version="0.1.0",
    description="Budget ledger that archives each pay period on payday",
    author="Your Name",
    author_email="you@example.com",
    url="https://github.com/yourusername/payday-ledger",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "python-dotenv>=0.19",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "payday-ledger=payday_ledger.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
