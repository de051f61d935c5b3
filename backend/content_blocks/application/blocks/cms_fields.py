from content_blocks.domain.visibility import VIEW_POLICY_LABELS
from content_blocks.models.group import Group


def viewer_groups_source():
    """Group id -> breadcrumbs, ordered by breadcrumbs."""
    groups_map = {group.id: group.breadcrumbs() for group in Group.query.all()}
    return dict(sorted(groups_map.items(), key=lambda item: item[1]))


def block_cms_fields(block, manager):
    """
    Field layout for the block edit form, as plain data for the admin UI.

    Order on the main tab: Type, (ExtraCSSClasses), Title. Legacy Area and
    Weight are never exposed.
    """
    main = [
        {
            "name": "type",
            "title": "Block Type",
            "field": "dropdown",
            "source": {name: name for name in manager.types.subtype_names()},
            "value": block.type,
        },
    ]

    if manager.get_use_extra_css_classes():
        main.append({
            "name": "extra_css_classes",
            "title": "Extra CSS Classes",
            "field": "text",
            "value": block.extra_css_classes,
        })

    main.append({
        "name": "title",
        "title": "Title",
        "field": "text",
        "required": True,
        "value": block.title,
    })

    viewer_groups = [
        {
            "name": "view_policy",
            "title": "Who can view this page?",
            "field": "optionset",
            "source": {policy.value: label for policy, label in VIEW_POLICY_LABELS.items()},
            "value": block.view_policy,
        },
        {
            "name": "viewer_group_ids",
            "title": "Viewer Groups",
            "field": "listbox",
            "multiple": True,
            "placeholder": "Click to select group",
            "source": viewer_groups_source(),
            "value": sorted(block.viewer_group_ids),
        },
    ]

    pages = [
        {
            "name": "pages",
            "title": "Used on pages",
            "field": "grid",
            "readonly": True,
            "value": [
                {"id": page.id, "title": page.title, "link": page.link()}
                for page in block.pages
            ],
        },
    ]

    return {
        "Root.Main": main,
        "Root.ViewerGroups": viewer_groups,
        "Root.Pages": pages,
    }
