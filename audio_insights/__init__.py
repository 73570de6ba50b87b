"""AudioInsights: transcribe and analyze audio with a hosted model."""
