from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from fishkeeper.db import get_db
from fishkeeper.errors import DuplicateRecordError, StoreError, ValidationError
from fishkeeper.models.saved_fish import SavedFish
from fishkeeper.models.species import Species
from fishkeeper.schemas.commons import FilterOption, Notice, SortOption
from fishkeeper.schemas.fish import AnnotationIn, ListState, SavedFishOut, ValidationOut
from fishkeeper.services.annotation.form import is_form_valid, save_annotation
from fishkeeper.services.collection.presenter import CollectionListPresenter
from fishkeeper.services.store.records import RecordStore

router = APIRouter()


def _out(f: SavedFish) -> SavedFishOut:
    return SavedFishOut(
        scientific_name=f.scientific_name,
        common_name=f.common_name,
        family_name=f.family_name,
        title=f.title,
        note=f.note,
        count=f.count,
        date_time=f.date_time,
    )


@router.get("")
@router.get("/")
def list_fish(
    search: str = "",
    filter_option: FilterOption = Query(FilterOption.keyword, alias="filter"),
    sort_option: SortOption = Query(SortOption.date_descending, alias="sort"),
    db: Session = Depends(get_db),
) -> list[SavedFishOut]:
    state = ListState(search_text=search, filter_option=filter_option, sort_option=sort_option)
    try:
        rows = CollectionListPresenter(RecordStore(db)).rows(state)
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return [_out(f) for f in rows]


@router.post("/validate")
def validate_annotation(payload: AnnotationIn) -> ValidationOut:
    # 保存ボタンの有効/無効判定
    return ValidationOut(valid=is_form_valid(payload))


@router.get("/{scientific_name}")
def get_fish(scientific_name: str, db: Session = Depends(get_db)) -> SavedFishOut:
    try:
        f = RecordStore(db).get(scientific_name)
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    if not f:
        raise HTTPException(status_code=404, detail="fish not found")
    return _out(f)


@router.post("/{scientific_name}", status_code=201)
def add_fish(scientific_name: str, payload: AnnotationIn, db: Session = Depends(get_db)) -> SavedFishOut:
    species = db.get(Species, scientific_name)
    if not species:
        raise HTTPException(status_code=404, detail="species not found")
    try:
        record = save_annotation(RecordStore(db), species, payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except DuplicateRecordError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return _out(record)


@router.delete("/{scientific_name}")
def delete_fish(scientific_name: str, db: Session = Depends(get_db)):
    store = RecordStore(db)
    try:
        found = store.get(scientific_name) is not None
    except StoreError as exc:
        # 削除操作は失敗しても通知だけ返す
        return JSONResponse(status_code=503, content=Notice(ok=False, message=str(exc)).model_dump())
    if not found:
        raise HTTPException(status_code=404, detail="fish not found")
    notice: Notice = CollectionListPresenter(store).delete(scientific_name)
    if not notice.ok:
        return JSONResponse(status_code=503, content=notice.model_dump())
    return notice
