# topmark:header:start
#
#   project      : GMLStream
#   file         : __init__.py
#   file_relpath : src/gmlstream/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI-framework independent helpers shared by the GMLStream command line."""
