# Services package init
"""
Chirper Backend: Services Layer
===============================

Business logic between routes (HTTP) and the database.

Service Inventory:
    - tweet_policy: validation rules for a tweet creation payload
    - TweetService: insert a tweet, hydrate its author, build the view
"""
