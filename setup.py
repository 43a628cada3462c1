"""Setup script for the catalog search package."""
from setuptools import setup, find_packages

setup(
    name="catalog_search",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "requests>=2.25.0",
        "flask>=2.2.0",
        "Flask-Limiter>=3.0.0",
        "python-dotenv>=0.19.0",
        "cachetools>=5.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "catalog-search=catalog_search.__main__:main",
        ],
    },
    python_requires=">=3.8",
    description="Aggregated search, browsing and statistics over external book catalog providers",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="catalog library books google-books open-library search",
    include_package_data=True,
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    ],
)
