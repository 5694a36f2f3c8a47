"""
Chat layer: console notifier, /alert and /stop handlers, interactive session.
"""
