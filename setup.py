from setuptools import setup, find_packages

setup(
    name="usportstats",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.25.0",
        "tenacity>=8.2.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "pydantic>=2.0.0",
        "pandas>=1.5.0,<3",
        "pyarrow>=12.0.0",
        "python-dotenv>=1.0.0",
        "sqlalchemy>=2.0.0",
        "fastapi>=0.100.0",
    ],
    extras_require={
        "postgres": ["psycopg[binary]>=3.1.0"],
        "service": ["uvicorn>=0.23.0"],
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "usportstats=usportstats.cli:main",
        ],
    },
    description="Canadian university sports statistics: schedules, box scores, play-by-play and rankings",
)
