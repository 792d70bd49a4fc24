# metanames: parse and format structured file names.
# Import the submodules (naming, attributes, rules, ...) directly;
# nothing is re-exported here.

__all__ = [
    "__version__",
]

# Must match the version in pyproject.toml.
__version__ = "0.1.0"
