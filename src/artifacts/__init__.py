"""Report, markdown and terminal renderings of a system map."""
