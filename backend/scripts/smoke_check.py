#!/usr/bin/env python3
# Prueba manual contra un backend en ejecución (uvicorn wms.main:app)
import requests
import json
import sys
import time

BACKEND_URL = "http://localhost:8000"

print("🔍 1. Verificando conexión con el backend...")
r = requests.get(f"{BACKEND_URL}/health")
print(json.dumps(r.json(), indent=2))

if r.json().get("status") != "ok":
    print("❌ Error de conexión. Verifica el backend.")
    sys.exit(1)

print("\n✅ Conexión OK!")

print("\n📐 2. Creando layout de prueba...")
layout_data = {"name": f"Smoke {time.strftime('%H:%M:%S')}", "rows": 2, "columns": 3}
r = requests.post(f"{BACKEND_URL}/api/v1/layouts/", json=layout_data)
if r.status_code != 201:
    print(f"❌ Error: {r.text}")
    sys.exit(1)
layout_id = r.json()["id"]
print(f"✅ Layout creado - ID {layout_id}")

print("\n📦 3. Creando grupo con ubicaciones...")
group_data = {
    "name": "A",
    "layout_id": layout_id,
    "column": 1,
    "rows": 2,
    "columns": 3,
    "address_format": "LETTER-NUMBER",
}
r = requests.post(f"{BACKEND_URL}/api/v1/groups/", json=group_data)
if r.status_code != 201:
    print(f"❌ Error: {r.text}")
    sys.exit(1)
group_id = r.json()["id"]

r = requests.get(f"{BACKEND_URL}/api/v1/groups/{group_id}/locations")
locations = r.json()
print(f"✅ Grupo creado - {len(locations)} ubicaciones")
for loc in locations:
    print(f"   {loc['address']}")

print("\n🔁 4. Alternando ocupación de la primera ubicación...")
r = requests.post(f"{BACKEND_URL}/api/v1/locations/{locations[0]['id']}/toggle")
print(f"   {r.json()['address']}: ocupada={r.json()['is_occupied']}")

print("\n🗑️ 5. Eliminando layout...")
r = requests.delete(f"{BACKEND_URL}/api/v1/layouts/{layout_id}")
r = requests.get(f"{BACKEND_URL}/api/v1/groups/{group_id}/locations")
if r.json():
    print("❌ Quedaron ubicaciones después de eliminar el layout")
    sys.exit(1)

print("\n" + "="*50)
print("✅ PRUEBA COMPLETADA")
print("="*50)
