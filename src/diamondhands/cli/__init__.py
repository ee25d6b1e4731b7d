"""DiamondHands command line interface."""
