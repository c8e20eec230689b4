from setuptools import setup, find_packages

setup(
    name="plotpad",
    version="0.1.0",
    packages=find_packages(exclude=['tests', 'tests.*', 'scripts', 'cache', '.pytest_cache']),
    install_requires=[
        "langchain-core>=0.3.0",
        "langchain-openai>=0.2.0",
        "openai>=1.0.0",
        "sqlalchemy>=2.0.0",
        "python-dotenv>=1.0.0",
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.0.0",
        "pandas>=2.1.0",
        "numpy>=1.24.0",
        "plotly>=5.18.0",
        "cryptography>=41.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.24.0",
        ],
    },
    python_requires=">=3.11",
)
