"""
News Module
===========

Everything about articles:
- Article model and category labels
- Keyword classification of English headlines
- Periodic sync from the upstream feed
- Read-only and admin services behind the API
"""
