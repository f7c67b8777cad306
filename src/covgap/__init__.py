"""covgap: compact coverage gap analyzer for llvm-cov export data."""

__version__ = "0.1.0"
