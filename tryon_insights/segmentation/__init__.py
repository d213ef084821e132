"""Rule-based user segmentation."""
