"""DMN simulator: inspect DMN decision tables and evaluate decisions with row highlighting."""
