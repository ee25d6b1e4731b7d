"""Application layer: DiamondHands operations."""
