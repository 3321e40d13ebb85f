[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "readlater"
version = "0.1.0"
description = "A small web service that turns saved links and notes into RSS feeds to read later."
requires-python = ">=3.10"
keywords = ["rss", "read-later", "bookmarks", "feeds", "wsgi", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "requests",
    "beautifulsoup4",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
readlater = "readlater.server:main"

[tool.hatch.build.targets.wheel]
packages = ["readlater"]

[tool.pytest.ini_options]
addopts = "-ra"
