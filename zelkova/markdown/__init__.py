"""Markdown document model, block detection, inline parsing and the parser."""