# Services package init
"""
Notekeeper Backend: Services Layer
====================================

What:  The note contract, independent of HTTP.

Service Inventory:
    - validator:   payload field rules (pure, no I/O)
    - sanitize:    markup escaping shared by the store's write paths
    - note_store:  create / read_all / read_one / update / delete

Routes compose them: validate, short-circuit on errors, then call the store.
"""
