"""TOT TROT: 아이와 함께할 주변 활동을 찾는 검색 클라이언트 코어."""
