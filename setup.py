"""Setup script for the project."""

from setuptools import setup, find_packages

setup(
    name="holistic-planner",
    version="1.0.0",
    description="AI meal plan and daily timetable generation from a holistic health profile",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "langchain-core>=0.2",
        "langchain-openai>=0.1",
        "langchain-anthropic>=0.1",
        "motor>=3.3",
        "pymongo>=4.6",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.25",
            "mongomock-motor>=0.0.29",
        ],
    },
    python_requires=">=3.10",
)
