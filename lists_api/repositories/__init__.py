"""레포지토리 패키지 (Repository package)."""
