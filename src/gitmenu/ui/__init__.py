"""Confirmation hosts: console prompts and Qt dialogs."""
