"""Application layer: errors, run context and the analysis pipeline."""
