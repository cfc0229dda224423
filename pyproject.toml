[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "loramote"
version = "0.1.0"
description = "LoRaWAN building blocks: AES-CTR/CMAC frame crypto, radio parameter encoding, debug formatting and LoRaMote sensor helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["lora", "lorawan", "aes", "cmac", "radio", "sensors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["loramote"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
