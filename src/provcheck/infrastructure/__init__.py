"""Infrastructure layer: file-backed collaborators of the engine.

The configuration store persists rule enablement; the record source
reads request records. Neither is consulted by the engine directly.
"""
