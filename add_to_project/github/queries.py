# Project v2のノードID取得（rootは"organization"または"user"）
GET_PROJECT_ID = """
query GetProject($projectOwnerName: String!, $projectNumber: Int!) {
  %(owner_type)s(login: $projectOwnerName) {
    projectV2(number: $projectNumber) {
      id
    }
  }
}
"""

# Projectのフィールド情報取得
GET_PROJECT_FIELDS = """
query GetProjectFields($projectId: ID!) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: 50) {
        nodes {
          ... on ProjectV2Field {
            id
            name
            dataType
          }
          ... on ProjectV2IterationField {
            id
            name
            dataType
          }
          ... on ProjectV2SingleSelectField {
            id
            name
            dataType
            options {
              id
              name
            }
          }
        }
      }
    }
  }
}
"""


def get_project_id_query(owner_type_query: str) -> str:
    """所有者の種類に応じたProject ID取得クエリを生成

    Args:
        owner_type_query: "organization" または "user"
    """
    return GET_PROJECT_ID % {"owner_type": owner_type_query}
