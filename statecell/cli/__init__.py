"""
statecell CLI

Commands:
- statecell replay - Replay a JSONL file of actions into a store
- statecell version - Show version information
"""
