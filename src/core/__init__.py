"""Core domain package for chatview.

Core holds the safe-HTML composition of a single message without any knowledge
of the upstream store or of how time, alert words, tags and reactions are
rendered, keeping the escaping rules in one place.
"""
