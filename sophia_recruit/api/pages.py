"""
HTML for the public application form
"""
from html import escape
from typing import List

FORM_TEMPLATE = """<!doctype html>
<html lang="fr">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>{title}</title>
  <style>
    body{{font-family:system-ui,sans-serif;margin:0;background:#DAF6FC;color:#061E3E}}
    .container{{max-width:720px;margin:0 auto;padding:24px}}
    .card{{background:#fff;border-radius:16px;padding:24px;box-shadow:0 4px 12px rgba(0,0,0,.08)}}
    label{{display:block;font-size:14px;font-weight:600;margin:12px 0 4px}}
    input,select,textarea{{width:100%;box-sizing:border-box;padding:10px;border:1px solid #d1d5db;border-radius:8px}}
    .row{{display:grid;grid-template-columns:1fr 1fr;gap:12px}}
    button{{margin-top:20px;width:100%;padding:12px;border:0;border-radius:8px;background:#145A8B;color:#fff;font-weight:600}}
    button:disabled{{opacity:.6}}
    .hint{{font-size:12px;color:#6b7280}}
  </style>
</head>
<body>
<div class="container">
  <h1>{title}</h1>
  <p>On cherche avant tout des personnalités. Des gens à l'aise avec les autres, qui aiment recevoir,
  bouger, travailler en équipe et donner de l'énergie à un lieu.</p>
  <div class="card" id="card">
    <form id="apply" enctype="multipart/form-data">
      <div class="row">
        <div><label>Prénom</label><input required name="first_name" placeholder="Jean"/></div>
        <div><label>Nom</label><input required name="last_name" placeholder="Dupont"/></div>
      </div>
      <div class="row">
        <div><label>Email</label><input required type="email" name="email" placeholder="jean.dupont@exemple.com"/></div>
        <div><label>Téléphone</label><input required type="tel" name="phone" placeholder="06 12 34 56 78"/></div>
      </div>
      <label>Poste souhaité</label>
      <select required name="position">
        <option value="">Sélectionnez un poste...</option>
        {position_options}
      </select>
      <div class="row">
        <div><label>Disponible du</label><input required type="date" name="start_date"/></div>
        <div><label>Au</label><input required type="date" name="end_date"/></div>
      </div>
      <label>CV (optionnel)</label>
      <input type="file" name="resume" accept="{accept}"/>
      <div class="hint">{accept_hint} jusqu'à {max_mb}MB</div>
      <label>Notes</label>
      <textarea name="notes" rows="4" placeholder="Parlez-nous un peu de vous et de votre expérience..."></textarea>
      <button type="submit" id="submit">Envoyer ma candidature</button>
    </form>
  </div>
</div>
<script>
  const form = document.getElementById('apply');
  form.addEventListener('submit', async (e) => {{
    e.preventDefault();
    const button = document.getElementById('submit');
    button.disabled = true;
    button.textContent = 'Envoi en cours...';
    try {{
      const res = await fetch('{submit_url}', {{ method: 'POST', body: new FormData(form) }});
      const body = await res.json();
      if (!res.ok) throw new Error(typeof body.detail === 'string' ? body.detail : 'Formulaire invalide');
      document.getElementById('card').innerHTML =
        '<h2>Candidature envoyée !</h2><p>Merci, nous reviendrons vers toi rapidement.</p>' +
        '<button onclick="window.location.reload()">Soumettre une autre candidature</button>';
    }} catch (err) {{
      alert(err.message);
    }} finally {{
      button.disabled = false;
      button.textContent = 'Envoyer ma candidature';
    }}
  }});
</script>
</body>
</html>
"""


def render_form(title: str, positions: List[str], allowed_extensions: List[str], max_mb: int,
                submit_url: str = "/api/applicants") -> str:
    options = "\n        ".join(
        f'<option value="{escape(p)}">{escape(p)}</option>' for p in positions
    )
    return FORM_TEMPLATE.format(
        title=escape(title),
        position_options=options,
        accept=",".join(allowed_extensions),
        accept_hint=", ".join(ext.lstrip('.').upper() for ext in allowed_extensions),
        max_mb=max_mb,
        submit_url=submit_url,
    )
