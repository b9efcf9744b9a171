"""Setup configuration for ai-web-tester package."""

from setuptools import setup, find_packages

setup(
    name="ai-web-tester",
    version="0.1.0",
    description="Browser test runner with AI failure analysis and HTML reports",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "openai>=1.0.0",
        "tiktoken>=0.5.0",
        "playwright>=1.40.0",
        "click>=8.1.0",
        "rich>=13.0.0",
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "httpx>=0.25.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ai-web-tester=ai_web_tester.cli:main",
        ],
    },
)
