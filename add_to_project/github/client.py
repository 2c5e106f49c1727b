import requests
import asyncio
from typing import Dict, Any
from add_to_project.utils.logger import get_logger
from add_to_project.utils.retry import retry_with_backoff

logger = get_logger(__name__)


class GitHubAPIError(Exception):
    """GitHub APIエラー（GraphQLエラーを含む）"""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


class GitHubAuthError(GitHubAPIError):
    """GitHub認証エラー"""

    pass


class GitHubClient:
    """GitHub GraphQL APIクライアント"""

    DEFAULT_API_URL = "https://api.github.com"

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL):
        self.api_url = f"{api_url.rstrip('/')}/graphql"
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    @retry_with_backoff(max_retries=3, no_retry=(GitHubAPIError,))
    async def execute_query(
        self, query: str, variables: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """GraphQLクエリを実行

        Args:
            query: GraphQLクエリ文字列
            variables: クエリ変数

        Returns:
            Dict[str, Any]: クエリ結果

        Raises:
            GitHubAuthError: 認証・権限エラー（401/403）
            GitHubAPIError: GraphQLエラー
            requests.HTTPError: その他のHTTPエラー
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        # requestsは同期ライブラリなので、非同期コンテキストで実行
        loop = asyncio.get_event_loop()
        response = await loop.run_in_executor(
            None,
            lambda: requests.post(
                self.api_url, json=payload, headers=self.headers, timeout=30
            ),
        )
        if response.status_code in (401, 403):
            logger.error(f"GitHub API rejected credentials: HTTP {response.status_code}")
            raise GitHubAuthError(
                f"GitHub token is not authorized (HTTP {response.status_code})"
            )
        response.raise_for_status()

        data = response.json()
        if data.get("errors"):
            logger.error(f"GraphQL errors: {data['errors']}")
            raise GitHubAPIError(f"GraphQL errors: {data['errors']}", data["errors"])

        return data["data"]
