"""Root documentation page for the task API."""

from html import escape

from ..schemas import TaskStatistics


def render_root_page(api_key: str, stats: TaskStatistics, base_url: str) -> str:
    """Return HTML for the documentation page with quick statistics."""
    key = escape(api_key)
    base = escape(base_url.rstrip("/"))
    by_priority = stats.tasks_by_priority
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Task API</title>
    <style>
        body {{ font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }}
        .endpoint {{ background: #f5f5f5; padding: 10px; margin: 10px 0; border-radius: 5px; }}
        .method {{ font-weight: bold; color: #007acc; }}
        code {{ background: #e8e8e8; padding: 2px 4px; border-radius: 3px; }}
        pre {{ background: #f8f8f8; padding: 10px; border-radius: 5px; overflow-x: auto; }}
        .stats-box {{ border: 1px solid #ccc; padding: 15px; margin-top: 20px; border-radius: 5px; background: #e6f7ff; }}
    </style>
</head>
<body>
    <h1>Task Management API</h1>
    <p>In-memory task API built with FastAPI.</p>

    <h2>Authentication</h2>
    <p>Send the key in the <code>X-Api-Key</code> header or the <code>api-key</code> query parameter.</p>
    <p><strong>Example key:</strong> <code>{key}</code></p>

    <div class="stats-box">
        <h3>Quick statistics</h3>
        <p><strong>Total tasks:</strong> {stats.total_tasks}</p>
        <p><strong>Pending:</strong> {stats.pending_tasks}</p>
        <p><strong>By priority:</strong> High ({by_priority.get("high", 0)}), Medium ({by_priority.get("medium", 0)}), Low ({by_priority.get("low", 0)})</p>
    </div>

    <h2>Endpoints</h2>

    <div class="endpoint">
        <span class="method">GET</span> <code>/api/tasks</code>
        <p>List tasks. Optional parameters: <code>completed</code>, <code>priority</code>, <code>q</code> (search). Public without parameters, <strong>requires the API key</strong> with them.</p>
    </div>

    <div class="endpoint">
        <span class="method">GET</span> <code>/api/tasks/stats</code>
        <p>Task statistics by priority and completions per day. <strong>Requires the API key.</strong></p>
    </div>

    <div class="endpoint">
        <span class="method">GET</span> <code>/api/tasks/:id</code>
        <p>Get one task by id.</p>
    </div>

    <div class="endpoint">
        <span class="method">POST</span> <code>/api/tasks</code>
        <p>Create a task. <code>title</code> is required (3-100 characters); <code>priority</code> must be high|medium|low.</p>
        <pre>{{
  "title": "My new task",
  "description": "Optional description",
  "priority": "high|medium|low"
}}</pre>
    </div>

    <div class="endpoint">
        <span class="method">PUT</span> <code>/api/tasks/:id</code>
        <p>Update a task. At least one field is required; <code>completed</code> must be a boolean. Completing a task records the completion time.</p>
    </div>

    <div class="endpoint">
        <span class="method">DELETE</span> <code>/api/tasks/:id</code>
        <p>Delete a task.</p>
    </div>

    <h2>Examples</h2>
    <h3>Statistics</h3>
    <pre>curl -H "X-Api-Key: {key}" "{base}/api/tasks/stats"</pre>

    <h3>Filtered list</h3>
    <pre>curl -H "X-Api-Key: {key}" "{base}/api/tasks?completed=false"</pre>

    <h3>Create a task</h3>
    <pre>curl -X POST -H "Content-Type: application/json" -H "X-Api-Key: {key}" -d '{{"title":"Learn HTTP","description":"Study web protocols"}}' {base}/api/tasks</pre>

    <p><strong>Current state:</strong> {stats.total_tasks} tasks stored</p>
</body>
</html>
"""
