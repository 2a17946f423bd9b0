"""
testsieve: turn the Go test runner's event stream into a compact report,
keeping only the output of the tests that failed.
"""
