"""
Keyword indexing and query engine package.

This package provides the in-memory code search stack:
- discovery: Source file enumeration with ignore-file chaining
- keywords: Term weight extraction with declaration boosts
- indexer: Directory index store and full-rebuild builder
- scoring: Prebuilt/fallback query scoring strategies
- code_info: Line-level file summaries
"""
