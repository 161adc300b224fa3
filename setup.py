from setuptools import setup, find_packages

setup(
    name="react_dictionary",
    version="0.1.0",
    packages=find_packages(include=["react_dictionary", "react_dictionary.*"]),
    package_data={"react_dictionary": ["services/*.yaml"]},
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy[asyncio]",
        "aiosqlite",
        "asyncpg",
        "python-jose[cryptography]",
        "httpx",
        "openai",
        "anthropic",
        "mistralai>=1.0,<2",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
