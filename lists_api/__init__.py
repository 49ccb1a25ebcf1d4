"""Lists API: 리스트/업무 관리 백엔드 패키지.

Lists API backend package: users, roles, permissions and teams
with JWT authentication and soft-delete ("retire") lifecycles.
"""
