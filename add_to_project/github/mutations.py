# Projectに追加
ADD_TO_PROJECT = """
mutation AddToProject($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: {
    projectId: $projectId
    contentId: $contentId
  }) {
    item {
      id
    }
  }
}
"""

# Projectにドラフトissueを追加（別オーナーのIssue/PR用）
ADD_DRAFT_ISSUE = """
mutation AddDraftIssue($projectId: ID!, $title: String!) {
  addProjectV2DraftIssue(input: {
    projectId: $projectId
    title: $title
  }) {
    projectItem {
      id
    }
  }
}
"""

# Custom fieldを更新
UPDATE_PROJECT_FIELD = """
mutation UpdateField($projectId: ID!, $itemId: ID!, $fieldId: ID!, $value: ProjectV2FieldValue!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $projectId
    itemId: $itemId
    fieldId: $fieldId
    value: $value
  }) {
    projectV2Item {
      id
    }
  }
}
"""
