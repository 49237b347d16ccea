INDEX_HTML = r"""<!doctype html>
<html lang="en" data-bs-theme="dark">
<head>
  <meta charset="utf-8">
  <title>{{ app_title }}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css" rel="stylesheet">
  {% if launching %}<meta http-equiv="refresh" content="5">{% endif %}
  <style>
    .path { color: rgba(255,255,255,.6); word-break: break-all; }
    .game-btn { text-align: left; }
  </style>
</head>
<body>
<nav class="navbar navbar-expand-lg bg-body-tertiary px-3">
  <a class="navbar-brand" href="{{ url_for('launcherz.index') }}">{{ app_title }}</a>
  <div class="ms-auto d-flex gap-2">
    <a class="btn btn-outline-light btn-sm" href="{{ url_for('launcherz.rescan') }}">Rescan</a>
  </div>
</nav>

<div class="container py-4">
  {% with messages = get_flashed_messages() %}
    {% if messages %}
      <div class="alert alert-warning">{{ messages|join(' ') }}</div>
    {% endif %}
  {% endwith %}
  {% if status %}
    <div class="small mb-3">{{ status }}
      {% if launching %}<span class="badge text-bg-warning ms-2">Running</span>{% endif %}
    </div>
  {% endif %}

  <div class="row g-3 mb-4">
    {% for mode, label, value in [('games', 'Games folder', settings.games_folder), ('shortcuts', 'Shortcuts folder', settings.shortcuts_folder)] %}
      <div class="col-md-6">
        <form action="{{ url_for('launcherz.pick_folder') }}" method="post" class="card p-3">
          <input type="hidden" name="mode" value="{{ mode }}">
          <label class="form-label">{{ label }}
            {% if active_mode and active_mode.value == mode %}<span class="badge text-bg-info ms-1">active</span>{% endif %}
          </label>
          <div class="input-group">
            <input class="form-control" type="text" name="path" value="{{ value or '' }}" placeholder="Absolute path">
            <button class="btn btn-primary" type="submit">Select</button>
          </div>
        </form>
      </div>
    {% endfor %}
  </div>

  {% if not items %}
    <div class="text-center py-5">
      {% if active_folder %}
        <h4>Nothing to launch in <code>{{ active_folder }}</code>.</h4>
        <p class="text-secondary">Games folder: one subfolder per game with its .exe inside. Shortcuts folder: .lnk files.</p>
      {% else %}
        <h4>Select a games folder or a shortcuts folder to get started.</h4>
      {% endif %}
    </div>
  {% else %}
    <div class="small path mb-2">{{ active_folder }}</div>
    <div class="d-grid gap-2">
      {% for it in items %}
        <form action="{{ url_for('launcherz.launch_item', name=it.name) }}" method="post">
          <input type="hidden" name="folder" value="{{ it.folder }}">
          <button class="btn btn-outline-light w-100 game-btn" type="submit" {% if launching %}disabled{% endif %}>
            {{ it.label }}
            {% if launching == it.name and launching_folder == it.folder %}<span class="badge text-bg-warning ms-2">Running</span>{% endif %}
          </button>
        </form>
      {% endfor %}
    </div>
  {% endif %}
</div>
</body>
</html>
"""
