# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- HTTP ---
    "httpx>=0.27.0",

    # --- MODELS & CONFIG ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",
]

extras_require = {
    # --- TESTS ---
    "test": [
        "pytest",
        "pytest-asyncio==1.3.0",
    ],
}

setup(
    name="academy-client",
    version="0.3.0",
    description="Academy learner client: session, progress and engagement state",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"academy": ["config/settings/*.yaml"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "academy-client=academy.app.main:main",
        ],
    },
    python_requires=">=3.11",
)
