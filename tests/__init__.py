"""Test suite package marker so ``tests.helpers`` resolves as a package."""
