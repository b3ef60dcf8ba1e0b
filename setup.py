# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="r5vstudio-core",
    version="1.0.0",
    description="Core services for R5V Studio: compressed project files, workspace trees and mod scaffolding",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["r5vstudio*"]),
    package_data={
        "r5vstudio.interface": ["locales/*.json"],
    },
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'r5vstudio=r5vstudio.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
