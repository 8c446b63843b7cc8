"""Document model, error taxonomy and constants shared by all layers."""
