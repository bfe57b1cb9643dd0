from setuptools import setup, find_packages

setup(
    name="ballot-relay-sdk",
    version="0.1.0",
    description="Python client for the Ballot Relay API and wallet reads",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.10",
    install_requires=["httpx>=0.25", "pydantic>=2.5", "eth-abi>=5.0", "eth-utils>=4.0"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
    ],
)
