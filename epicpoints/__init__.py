"""
Jira webhook bot that subtracts a new issue's story points from its epic.

Trigger: an ``issue_created`` event whose description contains ``@bot subtract``.
"""
