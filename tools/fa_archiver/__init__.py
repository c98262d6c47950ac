"""
Fur Affinity Archiver – Save a user's gallery to local disk.

Supports:
  • Archiving the main gallery and the scraps folder
  • Saving each image next to a plain-text description file
  • Sorting files into <user>/<listing>/<year>/<month> folders
  • Verifying image transfers against the declared content length
  • Safe re-runs (same item always lands on the same path)
"""
