# onboard/domains/usr/__init__.py

"""
'usr' 도메인 패키지입니다.

온보딩 요청의 제출자(submitted_by)와 승인 결정자(approved_by)를 식별하기 위한
사용자 계정, 비밀번호 로그인(JWT 발급), 관리자에 의한 사용자 생성을 담당합니다.
"""

__title__ = "Onboard User Domain"
__version__ = "0.1.0"
__all__ = ["models", "schemas", "crud", "routers"]
