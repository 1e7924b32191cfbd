from setuptools import find_packages, setup


setup(
    name="graph-trace-engine",
    version="0.1.0",
    description="Step-by-step traced graph algorithms with a partitioned Pregel PageRank",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2.0.0",
        "fastapi>=0.100.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
        ],
    },
)
