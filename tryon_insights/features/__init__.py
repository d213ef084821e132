"""Per-answer features: sentiment, age buckets and distributions."""
