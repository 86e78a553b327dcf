from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..deps import get_optional_user
from ..models import User

router = APIRouter(tags=["ui"], include_in_schema=False)

# ---------- Shared look ----------
BASE_CSS = """
:root{
  --bg:#0b0f14; --fg:#e6edf3; --muted:#9aa4af; --accent:#7aa2f7; --accent-hover:#5b8ef5;
  --card-bg:rgba(255,255,255,0.06); --border:rgba(255,255,255,0.12); --input-bg:rgba(255,255,255,0.06);
  --shadow:0 10px 30px rgba(0,0,0,.35); --radius:16px; --ok:#22c55e; --danger:#ef4444; --flame:#f97316;
}
@media (prefers-color-scheme: light){
  html:not([data-theme="dark"]){
    --bg:#eef2f7; --fg:#0b1220; --muted:#5c6773; --accent:#3b82f6; --accent-hover:#2563eb;
    --card-bg:rgba(255,255,255,0.6); --border:rgba(0,0,0,0.08); --input-bg:rgba(255,255,255,0.9);
    --shadow:0 10px 30px rgba(16,24,40,.15);
  }
}
html[data-theme="light"]{
  --bg:#eef2f7; --fg:#0b1220; --muted:#5c6773; --accent:#3b82f6; --accent-hover:#2563eb;
  --card-bg:rgba(255,255,255,0.6); --border:rgba(0,0,0,0.08); --input-bg:rgba(255,255,255,0.9);
  --shadow:0 10px 30px rgba(16,24,40,.15);
}
*{box-sizing:border-box}
body{ margin:0; min-height:100vh; color:var(--fg); font:16px/1.5 system-ui,-apple-system,Segoe UI,Roboto,Inter,Arial,sans-serif;
  background:
    radial-gradient(1200px 800px at 10% 10%, rgba(26,41,64,.6) 0%, transparent 55%),
    radial-gradient(1000px 700px at 90% 30%, rgba(66,32,70,.5) 0%, transparent 60%),
    var(--bg); }
a{ color:var(--accent); text-decoration:none } a:hover{ text-decoration:underline }
.container{ max-width:1200px; margin:0 auto; padding:32px 16px; }
.header{ display:flex; align-items:center; justify-content:space-between; gap:12px; margin-bottom:24px;
  backdrop-filter: blur(14px) saturate(120%); background:var(--card-bg); border:1px solid var(--border);
  border-radius:calc(var(--radius) + 4px); padding:12px 16px; box-shadow:var(--shadow); }
.header .brand{ font-weight:700; font-size:20px; }
.header .right{ display:flex; align-items:center; gap:12px; }
.streak{ color:var(--flame); font-size:14px; font-weight:600; }
.card{ backdrop-filter: blur(18px) saturate(140%); background:var(--card-bg); border:1px solid var(--border);
  border-radius:var(--radius); padding:18px; box-shadow:var(--shadow); }
label{ display:block; margin:10px 0 6px; color:var(--muted); font-size:13px; }
input, textarea, select{ width:100%; padding:10px 12px; border-radius:12px; border:1px solid var(--border);
  background:var(--input-bg); color:var(--fg); outline:none; }
input[type=checkbox]{ width:auto; }
button, .btn{ appearance:none; border:1px solid transparent; cursor:pointer;
  background:linear-gradient(180deg, var(--accent), var(--accent-hover)); color:white;
  padding:10px 14px; border-radius:12px; font-weight:600; }
button.secondary{ background:transparent; color:var(--fg); border-color:var(--border); }
button.ok{ background:var(--ok); } button.danger{ background:var(--danger); }
.muted{ color:var(--muted); font-size:13px; }
"""

THEME_JS = """
function applyTheme(theme){
  const root = document.documentElement;
  if(theme === "light" || theme === "dark"){ root.setAttribute("data-theme", theme); }
  else { root.removeAttribute("data-theme"); }
}
async function api(method, url, body){
  const res = await fetch(url, {
    method, headers: body === undefined ? {} : {"Content-Type": "application/json"},
    body: body === undefined ? undefined : JSON.stringify(body),
  });
  if(res.status === 401){ location.href = "/"; throw new Error("unauthorized"); }
  if(!res.ok){ throw new Error(method + " " + url + " failed: " + res.status); }
  return res.status === 204 ? null : res.json();
}
function escapeHtml(s){
  return String(s ?? "").replace(/[&<>"']/g, c => ({'&':'&amp;','<':'&lt;','>':'&gt;','"':'&quot;',"'":'&#039;'}[c]));
}
const PROPERTY_TYPES = ["TEXT","NUMBER","CHECKBOX","SELECT","MULTI_SELECT","DATE","URL","EMAIL","PHONE"];
function blankValue(type){ return type === "MULTI_SELECT" ? [] : (type === "CHECKBOX" ? false : null); }
"""


def page(title: str, body: str, script: str = "") -> HTMLResponse:
    return HTMLResponse(f"""<!doctype html>
<html lang="en">
<meta charset="utf-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{title}</title>
<style>{BASE_CSS}{EXTRA_CSS}</style>
<body>
{body}
<script>{THEME_JS}{script}</script>
</body>
</html>
""")


EXTRA_CSS = """
.canvas{ display:grid; grid-template-columns:repeat(auto-fill, minmax(200px, 1fr)); align-items:start; margin-top:16px; }
.task-card{ position:relative; width:100%; display:flex; flex-direction:column; align-items:center; justify-content:center;
  text-align:center; padding:14px; color:var(--fg); background:var(--card-bg); border:1px solid var(--border);
  border-radius:12px; box-shadow:var(--shadow); cursor:pointer; font-weight:500; min-height:60px; }
.task-card:hover{ filter:brightness(1.08); }
.task-card .dur{ position:absolute; bottom:8px; left:12px; font-size:12px; color:var(--muted); }
.task-card .props{ font-size:12px; color:var(--muted); margin-top:6px; }
.done-list{ list-style:none; padding:0; margin:12px 0 0; }
.done-list li{ display:flex; justify-content:space-between; align-items:center; padding:10px 12px; margin-bottom:8px;
  background:var(--card-bg); border:1px solid var(--border); border-radius:10px; }
.done-list .t{ text-decoration:line-through; color:var(--muted); }
.fab{ position:fixed; right:28px; bottom:28px; border-radius:999px; width:56px; height:56px; font-size:28px; padding:0; }
.modal{ display:none; position:fixed; inset:0; background:rgba(0,0,0,.5); backdrop-filter:blur(4px); z-index:10; }
.modal.open{ display:flex; align-items:center; justify-content:center; }
.modal .card{ width:min(640px, 94vw); max-height:90vh; overflow:auto; background:var(--bg); }
.row{ display:grid; grid-template-columns:5fr 7fr; gap:8px; align-items:center; margin-bottom:8px; }
.choices{ display:grid; grid-template-columns:repeat(3,1fr); gap:8px; margin-bottom:8px; }
.btn-row{ display:flex; gap:10px; flex-wrap:wrap; justify-content:flex-end; margin-top:16px; }
"""

# ---------- Landing ----------
LANDING_BODY = """
<div class="container" style="max-width:420px; padding-top:12vh; text-align:center">
  <h1 style="font-size:48px; margin:0">taskboard</h1>
  <p class="muted" style="font-style:italic">life manager</p>
  <form class="card" id="loginForm" style="text-align:left; margin-top:24px">
    <label>Email</label><input name="email" type="email" required/>
    <label>Name (optional)</label><input name="name"/>
    <div class="btn-row"><button type="submit">sign in</button></div>
  </form>
</div>
"""

LANDING_JS = """
document.getElementById("loginForm").addEventListener("submit", async (e) => {
  e.preventDefault();
  const f = new FormData(e.target);
  await api("POST", "/auth/login", {email: f.get("email"), name: f.get("name") || null});
  location.reload();
});
"""

# ---------- Dashboard ----------
DASHBOARD_BODY = """
<div class="container">
  <div class="header">
    <div class="brand">taskboard</div>
    <div class="right">
      <span class="streak" id="streak">0d streak</span>
      <button class="secondary" id="themeBtn" title="toggle theme">theme</button>
      <a href="/settings">settings</a>
      <button class="danger" id="signOut">sign out</button>
    </div>
  </div>
  <h3 id="activeCount">0 active tasks</h3>
  <div class="canvas" id="canvas"></div>
  <div id="completedWrap" style="margin-top:48px"></div>
</div>
<button class="fab" id="addBtn" title="add task">+</button>

<div class="modal" id="taskModal"><div class="card">
  <h2 style="margin-top:0">edit task</h2>
  <label>title</label><input id="editTitle"/>
  <label>duration (min)</label><input id="editDuration" type="number" min="1"/>
  <div id="editProps" style="margin-top:12px"></div>
  <div class="btn-row">
    <button class="danger" id="editDelete">delete</button>
    <button class="secondary" id="editClose">cancel</button>
    <button class="secondary" id="editSave">save</button>
    <button class="ok" id="editComplete">complete task</button>
  </div>
</div></div>

<div class="modal" id="addModal"><div class="card">
  <h2 style="margin-top:0">Create a New Task</h2>
  <label>Task Title</label><input id="addTitle" autofocus/>
  <label>duration</label>
  <div class="muted" id="aiStatus"></div>
  <div class="choices" id="aiChoices"></div>
  <input id="addDuration" type="number" min="1" placeholder="Custom duration (min)..."/>
  <div id="addProps" style="margin-top:12px"></div>
  <button class="secondary" id="addProp" type="button">+ add property</button>
  <div class="btn-row">
    <button class="secondary" id="addCancel">Cancel</button>
    <button class="ok" id="addCreate">Create Task</button>
  </div>
</div></div>
"""

DASHBOARD_JS = """
let board = null, selected = null, addProps = [], editProps = [], aiTimer = null;
const THEMES = ["system", "light", "dark"];

function valueInput(p, onChange){
  const wrap = document.createElement("div");
  let el;
  if(p.type === "SELECT" || p.type === "MULTI_SELECT"){
    el = document.createElement("select");
    if(p.type === "MULTI_SELECT"){ el.multiple = true; } else { el.append(new Option("select an option...", "")); }
    (p.options || []).forEach(o => {
      const selectedNow = p.type === "MULTI_SELECT" ? (p.value || []).includes(o.name) : p.value === o.name;
      el.append(new Option(o.name, o.name, false, selectedNow));
    });
    el.onchange = () => onChange(p.type === "MULTI_SELECT" ? [...el.selectedOptions].map(o => o.value) : el.value);
  } else if(p.type === "CHECKBOX"){
    el = document.createElement("input"); el.type = "checkbox"; el.checked = !!p.value;
    el.onchange = () => onChange(el.checked);
  } else {
    el = document.createElement("input");
    el.type = {NUMBER:"number", DATE:"date", URL:"url", EMAIL:"email", PHONE:"tel"}[p.type] || "text";
    el.value = p.value ?? "";
    el.oninput = () => onChange(el.value);
  }
  wrap.append(el);
  return wrap;
}

function renderProps(container, props, editable){
  container.innerHTML = "";
  props.forEach((p, i) => {
    const row = document.createElement("div"); row.className = "row";
    const left = document.createElement("div");
    if(editable){
      const name = document.createElement("input"); name.value = p.name;
      name.oninput = () => { p.name = name.value; };
      const type = document.createElement("select");
      PROPERTY_TYPES.forEach(t => type.append(new Option(t.toLowerCase().replace("_", " "), t, false, t === p.type)));
      type.onchange = () => { p.type = type.value; p.value = blankValue(p.type); renderProps(container, props, editable); };
      left.append(name, type);
      if(p.type === "SELECT" || p.type === "MULTI_SELECT"){
        const opts = document.createElement("input"); opts.placeholder = "options, comma separated";
        opts.value = (p.options || []).map(o => o.name).join(", ");
        opts.onchange = () => {
          p.options = opts.value.split(",").map(s => s.trim()).filter(Boolean).map(name => ({name}));
          renderProps(container, props, editable);
        };
        left.append(opts);
      }
    } else {
      left.textContent = p.name;
    }
    row.append(left, valueInput(p, v => { p.value = v; }));
    container.append(row);
  });
}

function paint(){
  applyTheme(board.theme);
  document.getElementById("streak").textContent = board.streak + "d streak";
  document.getElementById("activeCount").textContent = board.counts.active + " active tasks";
  const canvas = document.getElementById("canvas");
  canvas.style.gap = board.gap + "px";
  canvas.innerHTML = "";
  board.active.forEach(t => {
    const b = document.createElement("button");
    b.className = "task-card"; b.style.height = t.height + "px";
    const props = t.properties.filter(p => p.value !== null && p.value !== "" && !(Array.isArray(p.value) && !p.value.length))
      .map(p => escapeHtml(p.name) + ": " + escapeHtml(Array.isArray(p.value) ? p.value.join(", ") : p.value)).join(" · ");
    b.innerHTML = `<span>${escapeHtml(t.title)}</span>` + (props ? `<div class="props">${props}</div>` : "") +
      `<span class="dur">${t.duration} min</span>`;
    b.onclick = () => openTask(t.id);
    canvas.append(b);
  });
  const wrap = document.getElementById("completedWrap");
  if(!board.completed.length){ wrap.innerHTML = ""; return; }
  wrap.innerHTML = `<h3>${board.counts.completed} completed tasks</h3><ul class="done-list" id="doneList"></ul>`;
  const list = document.getElementById("doneList");
  board.completed.forEach(t => {
    const li = document.createElement("li");
    li.innerHTML = `<div><div class="t">${escapeHtml(t.title)}</div><div class="muted">completed in ${t.duration} minutes</div></div>`;
    const actions = document.createElement("div");
    const reopen = document.createElement("button"); reopen.className = "secondary"; reopen.textContent = "re-open";
    reopen.onclick = async () => { await api("PATCH", "/api/tasks/" + t.id, {completed: false}); load(); };
    const del = document.createElement("button"); del.className = "secondary"; del.textContent = "delete";
    del.onclick = async () => { await api("DELETE", "/api/tasks/" + t.id); load(); };
    actions.append(reopen, del);
    li.append(actions);
    list.append(li);
  });
}

async function load(){ board = await api("GET", "/api/board"); paint(); }

async function openTask(id){
  selected = await api("GET", "/api/tasks/" + id);
  editProps = JSON.parse(JSON.stringify(selected.properties || []));
  document.getElementById("editTitle").value = selected.title;
  document.getElementById("editDuration").value = selected.duration;
  renderProps(document.getElementById("editProps"), editProps, false);
  document.getElementById("taskModal").classList.add("open");
}
function closeModals(){ document.querySelectorAll(".modal").forEach(m => m.classList.remove("open")); }

document.getElementById("editClose").onclick = closeModals;
document.getElementById("editSave").onclick = async () => {
  await api("PATCH", "/api/tasks/" + selected.id, {
    title: document.getElementById("editTitle").value,
    duration: Number(document.getElementById("editDuration").value),
    properties: editProps,
  });
  closeModals(); load();
};
document.getElementById("editComplete").onclick = async () => {
  await api("PATCH", "/api/tasks/" + selected.id, {completed: true});
  closeModals(); load();
};
document.getElementById("editDelete").onclick = async () => {
  await api("DELETE", "/api/tasks/" + selected.id);
  closeModals(); load();
};

document.getElementById("addBtn").onclick = async () => {
  const defaults = await api("GET", "/api/settings/default-properties");
  addProps = defaults.map(d => ({name: d.name, type: d.type, options: d.options, value: blankValue(d.type)}));
  document.getElementById("addTitle").value = "";
  document.getElementById("addDuration").value = "";
  document.getElementById("aiChoices").innerHTML = "";
  document.getElementById("aiStatus").textContent = "";
  renderProps(document.getElementById("addProps"), addProps, true);
  document.getElementById("addModal").classList.add("open");
};
document.getElementById("addProp").onclick = () => {
  addProps.push({name: "new property", type: "TEXT", value: null});
  renderProps(document.getElementById("addProps"), addProps, true);
};
document.getElementById("addCancel").onclick = closeModals;
document.getElementById("addTitle").oninput = (e) => {
  clearTimeout(aiTimer);
  const title = e.target.value.trim();
  const choices = document.getElementById("aiChoices");
  if(title.length < 5){ choices.innerHTML = ""; return; }
  aiTimer = setTimeout(async () => {
    const status = document.getElementById("aiStatus");
    status.textContent = "Getting suggestion...";
    try{
      const rec = await api("POST", "/api/ai/recommend", {title});
      choices.innerHTML = "";
      rec.choices.forEach(m => {
        const b = document.createElement("button"); b.type = "button"; b.className = "secondary";
        b.textContent = m + " min";
        b.onclick = () => { document.getElementById("addDuration").value = m; };
        choices.append(b);
      });
      status.textContent = "";
    }catch(err){ status.textContent = ""; console.error(err); }
  }, 750);
};
document.getElementById("addCreate").onclick = async () => {
  const title = document.getElementById("addTitle").value.trim();
  const duration = Number(document.getElementById("addDuration").value);
  if(!title || !duration){ return; }
  await api("POST", "/api/tasks", {title, duration, properties: addProps});
  closeModals(); load();
};

document.getElementById("themeBtn").onclick = async () => {
  const next = THEMES[(THEMES.indexOf(board.theme) + 1) % THEMES.length];
  await api("PUT", "/api/settings/appearance", {theme: next});
  board.theme = next; applyTheme(next);
};
document.getElementById("signOut").onclick = async () => { await api("POST", "/auth/logout"); location.href = "/"; };

load();
"""

# ---------- Settings ----------
SETTINGS_BODY = """
<div class="container" style="max-width:760px">
  <div class="header">
    <div class="brand">settings</div>
    <div class="right"><a href="/">return to dashboard</a></div>
  </div>
  <div class="card">
    <h2 style="margin-top:0">appearance</h2>
    <label>theme</label>
    <select id="theme"><option>system</option><option>light</option><option>dark</option></select>
    <label>task spacing</label>
    <select id="spacing"><option>default</option><option>compact</option><option>comfortable</option></select>
  </div>
  <div class="card" style="margin-top:20px">
    <h2 style="margin-top:0">property visibility</h2>
    <p class="muted">Hidden properties are left off the task cards.</p>
    <div id="visibility"></div>
  </div>
  <div class="card" style="margin-top:20px">
    <h2 style="margin-top:0">default properties</h2>
    <p class="muted">Attached to every new task.</p>
    <div id="defaults"></div>
    <div class="btn-row">
      <button class="secondary" id="addDefault">+ add property</button>
      <button id="saveDefaults">save</button>
    </div>
    <div class="muted" id="saved"></div>
  </div>
</div>
"""

SETTINGS_JS = """
let settings = null, defaults = [];

function renderDefaults(){
  const box = document.getElementById("defaults");
  box.innerHTML = "";
  defaults.forEach((d, i) => {
    const row = document.createElement("div"); row.className = "row";
    const name = document.createElement("input"); name.value = d.name; name.oninput = () => { d.name = name.value; };
    const right = document.createElement("div");
    const type = document.createElement("select");
    PROPERTY_TYPES.forEach(t => type.append(new Option(t.toLowerCase().replace("_", " "), t, false, t === d.type)));
    type.onchange = () => { d.type = type.value; renderDefaults(); };
    right.append(type);
    if(d.type === "SELECT" || d.type === "MULTI_SELECT"){
      const opts = document.createElement("input"); opts.placeholder = "options, comma separated";
      opts.value = (d.options || []).map(o => o.name).join(", ");
      opts.onchange = () => { d.options = opts.value.split(",").map(s => s.trim()).filter(Boolean).map(name => ({name})); };
      right.append(opts);
    }
    const del = document.createElement("button"); del.className = "secondary"; del.textContent = "remove";
    del.onclick = () => { defaults.splice(i, 1); renderDefaults(); };
    right.append(del);
    row.append(name, right);
    box.append(row);
  });
}

async function renderVisibility(){
  const [props, tasks] = await Promise.all([api("GET", "/api/properties"), api("GET", "/api/tasks")]);
  const names = new Set([...props.map(p => p.name), ...defaults.map(d => d.name)]);
  [...tasks.active, ...tasks.completed].forEach(t => (t.properties || []).forEach(p => names.add(p.name)));
  Object.keys(settings.property_visibility).forEach(n => names.add(n));
  const box = document.getElementById("visibility");
  box.innerHTML = names.size ? "" : "<div class='muted'>No properties yet.</div>";
  [...names].sort().forEach(n => {
    const label = document.createElement("label");
    const cb = document.createElement("input"); cb.type = "checkbox";
    cb.checked = settings.property_visibility[n] !== false;
    cb.onchange = async () => {
      settings.property_visibility[n] = cb.checked;
      const res = await api("PUT", "/api/settings/visibility", settings.property_visibility);
      settings.property_visibility = res.property_visibility;
    };
    label.append(cb, " " + n);
    box.append(label);
  });
}

async function load(){
  settings = await api("GET", "/api/settings");
  defaults = await api("GET", "/api/settings/default-properties");
  applyTheme(settings.theme);
  document.getElementById("theme").value = settings.theme;
  document.getElementById("spacing").value = settings.task_spacing;
  renderDefaults();
  renderVisibility();
}

document.getElementById("theme").onchange = async (e) => {
  await api("PUT", "/api/settings/appearance", {theme: e.target.value});
  applyTheme(e.target.value);
};
document.getElementById("spacing").onchange = async (e) => {
  await api("PUT", "/api/settings/appearance", {task_spacing: e.target.value});
};
document.getElementById("addDefault").onclick = () => { defaults.push({name: "new property", type: "TEXT", options: []}); renderDefaults(); };
document.getElementById("saveDefaults").onclick = async () => {
  defaults = await api("PUT", "/api/settings/default-properties", defaults.filter(d => d.name.trim()));
  renderDefaults();
  document.getElementById("saved").textContent = "saved";
};

load();
"""


# ---------- Routes ----------
@router.get("/", response_class=HTMLResponse)
def home(user: Optional[User] = Depends(get_optional_user)):
    if user is None:
        return page("taskboard", LANDING_BODY, LANDING_JS)
    return page("taskboard", DASHBOARD_BODY, DASHBOARD_JS)


@router.get("/settings", response_class=HTMLResponse)
def settings_page(user: Optional[User] = Depends(get_optional_user)):
    if user is None:
        return page("taskboard", LANDING_BODY, LANDING_JS)
    return page("settings • taskboard", SETTINGS_BODY, SETTINGS_JS)
