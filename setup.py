# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="stringfinder",
    version="1.0.0",
    description="Find strings in directory trees, expanding nested ZIP archives first",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["stringfinder*"]),
    package_data={
        "stringfinder.interface.locales": ["*.json"],
    },
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'stringfinder=stringfinder.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
