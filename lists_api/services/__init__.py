"""서비스 패키지: 비즈니스 로직 계층 (Business logic layer)."""
