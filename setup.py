# setup.py
from setuptools import setup, find_packages

setup(
    name="follower_scout",
    version="0.1.0",
    description="Best-effort follower counter for public profile pages",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "cachetools>=5.3",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "follower-scout=follower_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
