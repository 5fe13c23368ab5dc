"""Default collaborators and input mapping for the core message renderer."""
