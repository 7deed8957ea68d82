"""Standalone NiceGUI application serving the in vitro and in vivo explorer pages."""
