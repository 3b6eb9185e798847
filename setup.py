from setuptools import find_packages, setup

setup(
    name="account-guard",
    version="0.1.0",
    packages=find_packages(include=["account_guard", "account_guard.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click",
        "pandas",
        "python-dotenv",
        "sqlalchemy>=2.0",
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={
        "console_scripts": [
            "account-guard=account_guard.cli.main:cli",
        ],
    },
)
