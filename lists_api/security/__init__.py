"""보안 패키지: 비밀번호 해싱 및 권한 검사.

Security package: password hashing and authorization guards.
"""
