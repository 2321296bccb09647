"""
Loading of the repository list that drives the index build.
"""
