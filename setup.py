import setuptools

setuptools.setup(
    name="lnd_example_client",
    version="0.1.0",
    author="Pierre Rochard",
    packages=setuptools.find_packages(
        exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "grpcio>=1.50",
        "protobuf>=4.22",
        "structlog",
        "cryptography",
        "pymacaroons",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "lnd-example=lnd_example.cli:main",
        ],
    },
    python_requires='>=3.7',
)
