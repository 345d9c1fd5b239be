"""
Release bookkeeping for skill packages.

- changesets: pending version bumps declared as small Markdown files
- versioning: consumes changesets into package.json / CHANGELOG.md
- tagging: ``name@version`` git tags and GitHub releases
- readiness: pre-release consistency gate
"""
