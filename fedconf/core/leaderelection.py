"""Leader election timing constants."""

# Multiplier applied to the retry period when the leader-election client adds
# jitter between attempts. A renew deadline must outlast one jittered retry.
DEFAULT_JITTER_FACTOR = 1.2
