"""Fieldplan: business-month weekly scheduling for field-operations staff."""
