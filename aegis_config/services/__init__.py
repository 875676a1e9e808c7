"""Services Layer - imperative shell sequencing core logic around filesystem IO."""
