import asyncio
from typing import Dict, List, Optional, TypedDict
from langgraph.graph import StateGraph, END
from add_to_project.config import Settings
from add_to_project.github.client import GitHubClient
from add_to_project.github.models import EventContext, FieldUpdate, ProjectLocation
from add_to_project.github.mutations import ADD_DRAFT_ISSUE, ADD_TO_PROJECT, UPDATE_PROJECT_FIELD
from add_to_project.github.queries import GET_PROJECT_FIELDS, get_project_id_query
from add_to_project.resolver.field_updates import resolve_field_updates
from add_to_project.resolver.label_filter import should_process
from add_to_project.utils.event import load_event
from add_to_project.utils.logger import get_logger
from add_to_project.utils.outputs import set_output
from add_to_project.utils.project_url import owner_type_query, parse_project_url

logger = get_logger(__name__)


class WorkflowState(TypedDict):
    """ワークフロー状態"""

    event: Optional[EventContext]
    desired_fields: Dict[str, str]
    project: Optional[ProjectLocation]
    project_id: str
    field_updates: List[FieldUpdate]
    item_id: str
    applied_fields: List[str]
    skipped: bool
    error: str


class AddToProjectWorkflow:
    """Issue/PRをProjectに追加し、カスタムフィールドを設定するワークフロー"""

    STEPS = (
        "load_inputs",
        "filter_labels",
        "get_project",
        "resolve_fields",
        "add_item",
        "update_fields",
    )

    def __init__(self, settings: Settings, client: Optional[GitHubClient] = None):
        self.settings = settings
        self.client = client or GitHubClient(
            settings.GITHUB_TOKEN, api_url=settings.GITHUB_API_URL
        )
        self.workflow = self._build_workflow()

    def _build_workflow(self) -> StateGraph:
        """LangGraphワークフローを構築"""

        workflow = StateGraph(WorkflowState)

        # ノード追加
        workflow.add_node("load_inputs", self._load_inputs)
        workflow.add_node("filter_labels", self._filter_labels)
        workflow.add_node("get_project", self._get_project)
        workflow.add_node("resolve_fields", self._resolve_fields)
        workflow.add_node("add_item", self._add_item)
        workflow.add_node("update_fields", self._update_fields)

        # エッジ追加（エラーまたはスキップ時はそこで終了）
        workflow.set_entry_point(self.STEPS[0])
        for current, following in zip(self.STEPS, self.STEPS[1:]):
            workflow.add_conditional_edges(
                current,
                self._should_continue,
                {"continue": following, "stop": END},
            )
        workflow.add_edge(self.STEPS[-1], END)

        return workflow.compile()

    def _fail(self, state: WorkflowState, message: str, error: Exception) -> WorkflowState:
        state["error"] = f"{message}: {error}"
        logger.error(state["error"])
        logger.debug("Failure details", exc_info=True)
        return state

    def _should_continue(self, state: WorkflowState) -> str:
        """次のステップに進むか判定"""
        if state.get("error") or state.get("skipped"):
            return "stop"
        return "continue"

    async def _load_inputs(self, state: WorkflowState) -> WorkflowState:
        """イベントと入力値を読み込む"""
        try:
            state["event"] = load_event(self.settings.GITHUB_EVENT_PATH)
            state["desired_fields"] = self.settings.desired_fields
        except Exception as e:
            return self._fail(state, "Invalid input", e)

        return state

    async def _filter_labels(self, state: WorkflowState) -> WorkflowState:
        """`labeled`フィルタを適用"""
        labeled = self.settings.labels
        operator = self.settings.LABEL_OPERATOR
        event = state["event"]

        if not should_process(labeled, operator, event.label_names):
            state["skipped"] = True
            logger.info(
                f"Skipping issue {event.content.number} because it does not satisfy "
                f"label-operator '{operator}' for labels: {', '.join(labeled)}"
            )

        return state

    async def _get_project(self, state: WorkflowState) -> WorkflowState:
        """ProjectのノードIDを取得

        URLはラベルフィルタを通過した後に解析する（スキップ時は不正なURLでも失敗しない）。
        """
        try:
            project = parse_project_url(self.settings.PROJECT_URL)
            state["project"] = project

            logger.debug(f"Project URL: {self.settings.PROJECT_URL}")
            logger.debug(f"Project owner: {project.owner_name}")
            logger.debug(f"Project number: {project.number}")
            logger.debug(f"Project owner type: {project.owner_type}")

            root = owner_type_query(project.owner_type)
            result = await self.client.execute_query(
                get_project_id_query(root),
                {
                    "projectOwnerName": project.owner_name,
                    "projectNumber": project.number,
                },
            )

            project_v2 = (result.get(root) or {}).get("projectV2")
            if not project_v2:
                raise LookupError(
                    f"Project {project.number} not found for {project.owner_name}"
                )

            state["project_id"] = project_v2["id"]
            logger.debug(f"Project node ID: {state['project_id']}")
        except Exception as e:
            return self._fail(state, "Failed to look up project", e)

        return state

    async def _resolve_fields(self, state: WorkflowState) -> WorkflowState:
        """Projectのフィールド定義を取得し、更新内容を解決"""
        if not state["desired_fields"]:
            logger.debug("No custom fields requested")
            return state

        try:
            result = await self.client.execute_query(
                GET_PROJECT_FIELDS, {"projectId": state["project_id"]}
            )
            node = result.get("node") or {}
            schema = (node.get("fields") or {}).get("nodes") or []

            state["field_updates"] = resolve_field_updates(
                state["desired_fields"], schema, log=logger
            )
            logger.info(
                f"Resolved {len(state['field_updates'])} of "
                f"{len(state['desired_fields'])} requested fields"
            )
        except Exception as e:
            return self._fail(state, "Failed to resolve project fields", e)

        return state

    async def _add_item(self, state: WorkflowState) -> WorkflowState:
        """Issue/PRをProjectに追加

        Projectと同じオーナーのIssue/PRはそのまま追加し、
        それ以外はURLをタイトルにしたドラフトissueを作成する。
        """
        event = state["event"]
        project = state["project"]
        same_owner = (event.owner_login or "").lower() == project.owner_name.lower()

        try:
            logger.debug(f"Content ID: {event.content.node_id}")
            if same_owner:
                logger.info("Creating project item")
                result = await self.client.execute_query(
                    ADD_TO_PROJECT,
                    {
                        "projectId": state["project_id"],
                        "contentId": event.content.node_id,
                    },
                )
                state["item_id"] = result["addProjectV2ItemById"]["item"]["id"]
            else:
                logger.info("Creating draft issue in project")
                result = await self.client.execute_query(
                    ADD_DRAFT_ISSUE,
                    {
                        "projectId": state["project_id"],
                        "title": event.content.html_url,
                    },
                )
                state["item_id"] = result["addProjectV2DraftIssue"]["projectItem"]["id"]

            set_output("itemId", state["item_id"], self.settings.GITHUB_OUTPUT)
        except Exception as e:
            return self._fail(state, "Failed to add item to project", e)

        return state

    async def _update_fields(self, state: WorkflowState) -> WorkflowState:
        """解決済みのフィールド更新を1件ずつ適用"""
        try:
            for update in state["field_updates"]:
                try:
                    value = update.to_graphql_value()
                except ValueError:
                    logger.warning(
                        f"Skipping field {update.fieldId}: "
                        f"{update.value.model_dump()} is not a valid number"
                    )
                    continue

                await self.client.execute_query(
                    UPDATE_PROJECT_FIELD,
                    {
                        "projectId": state["project_id"],
                        "itemId": state["item_id"],
                        "fieldId": update.fieldId,
                        "value": value,
                    },
                )
                state["applied_fields"].append(update.fieldId)

            if state["applied_fields"]:
                logger.info(f"Updated {len(state['applied_fields'])} project fields")
        except Exception as e:
            return self._fail(state, "Failed to update project fields", e)

        return state

    async def execute(self, timeout_seconds: int = 300) -> WorkflowState:
        """ワークフローを実行

        Args:
            timeout_seconds: タイムアウト時間（秒）

        Returns:
            WorkflowState: 実行結果
        """
        initial_state = WorkflowState(
            event=None,
            desired_fields={},
            project=None,
            project_id="",
            field_updates=[],
            item_id="",
            applied_fields=[],
            skipped=False,
            error="",
        )

        try:
            result = await asyncio.wait_for(
                self.workflow.ainvoke(initial_state), timeout=timeout_seconds
            )
            return result
        except asyncio.TimeoutError:
            logger.error(f"Workflow timeout after {timeout_seconds}s")
            initial_state["error"] = "Workflow timeout"
            return initial_state
