# ABOUTME: Core catalog operations: the store facade, verification, and batch import.
