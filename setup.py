from setuptools import find_packages, setup

setup(
    name="aacmap",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    license="MIT License",
    description=(
        "Two level AAC board mappings backed by a linear search associative array"
    ),
    install_requires=[
        "attrs>=22.2.0",
        "prompt-toolkit>=3.0.0,<4.0.0",
        "pyrsistent>=0.18.0,<1.0.0",
        "typing-extensions>=4.7.0,<5.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": ["aacmap = aacmap.cli:invoke_cli"],
    },
)
