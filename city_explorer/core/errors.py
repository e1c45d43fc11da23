# city_explorer/core/errors.py
# -----------------------------------------------------------------------------
# 도메인 예외
# - ProviderError: 외부 API 호출 실패 (네트워크/HTTP 오류, 키 누락, 응답 형식 오류)
# - NoDataError: 외부 API는 성공했지만 사용할 결과가 없음 (예: 지오코딩 0건)
# -----------------------------------------------------------------------------


class CityExplorerError(Exception):
    pass


class ProviderError(CityExplorerError):
    def __init__(self, provider: str, message: str):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.message = message


class NoDataError(CityExplorerError):
    pass
