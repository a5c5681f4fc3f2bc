from setuptools import setup, find_packages

setup(
    name="puml_ld",
    version="1.0.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"puml_ld.shapes": ["definitions/*.ttl"]},
    install_requires=[
        "pydantic>=2.0.0",
        "networkx>=3.0",
        "matplotlib>=3.4.3",
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "puml-ld-server=puml_ld.api.server:main",
        ],
    },
    python_requires=">=3.9",
)
