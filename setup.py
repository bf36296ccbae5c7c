from setuptools import setup, find_packages

setup(
    name="flight_management",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "example"]),
    package_data={
        "flight_management": ["data/*.json"],
    },
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.22.0",
        "pydantic>=2.0",
        "python-dateutil>=2.8.1",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "httpx>=0.24.0",
        ]
    },
    description="Flight operations management: scheduling conflict validation and arrival forecasting",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
)
