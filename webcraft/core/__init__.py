"""Generation pipeline: prompt enrichment, model gateway and result records."""
