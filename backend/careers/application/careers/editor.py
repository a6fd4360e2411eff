from careers.domain.editor import PageEditor
from careers.normalizers.page_config import normalize_page_config
from flask import current_app, has_app_context
from .page_config import get_or_create_page_config
from .publish_page import publish_page
from .save_draft import save_draft


def _call_in_app_context(app, fn, **kwargs):
    # autosave timers fire on their own thread, outside any app context
    if has_app_context():
        return fn(**kwargs)
    with app.app_context():
        return fn(**kwargs)


def load_editor(*, company_id: str, autosave: bool = False, **kwargs) -> PageEditor:
    """
    Build a PageEditor over the company's stored draft.

    Save and publish are bound to this company's store. With ``autosave``
    edits are saved after ``AUTOSAVE_DEBOUNCE_SECONDS`` of quiet. Extra
    keyword arguments (e.g. ``timer_factory``) pass through to the editor.
    """
    app = current_app._get_current_object()
    if autosave:
        kwargs.setdefault("autosave_delay", app.config["AUTOSAVE_DEBOUNCE_SECONDS"])
    page_config = get_or_create_page_config(company_id=company_id)

    def store(document):
        _call_in_app_context(app, save_draft, company_id=company_id, document=document)

    def publisher():
        return _call_in_app_context(app, publish_page, company_id=company_id)

    def report(exc):
        app.logger.error(f"Autosave failed for company {company_id}: {exc}")

    kwargs.setdefault("on_autosave_error", report)

    return PageEditor.from_document(
        normalize_page_config(page_config),
        save_fn=store,
        publish_fn=publisher,
        **kwargs,
    )
