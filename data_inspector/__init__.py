"""Core logic for the Data Inspector tools.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- validate raw JSON / CSV input
- parse delimited text into tables
- process large row sets in cooperative chunks
- slice pages out of large tables
- measure processing cost
- encode tool state into shareable links
"""
