"""Notes with YAML frontmatter, the vault that stores them, and folder structure."""