import asyncio

from hand_pointer.visual import POINTER_CLICK_COLOR, POINTER_COLOR, PointerIndicator


def test_show_and_hide():
    ind = PointerIndicator()
    assert not ind.visible
    ind.show(12.5, 40)
    assert ind.visible
    assert ind.position == (12.5, 40)
    ind.hide()
    assert not ind.visible


def test_flash_reverts_after_delay():
    async def scenario():
        ind = PointerIndicator(flash_ms=20)
        ind.flash_click()
        assert ind.click_flash_active
        assert ind.color == POINTER_CLICK_COLOR
        await asyncio.sleep(0.06)
        assert not ind.click_flash_active
        assert ind.color == POINTER_COLOR

    asyncio.run(scenario())


def test_overlapping_flash_restarts_timer():
    async def scenario():
        ind = PointerIndicator(flash_ms=200)
        ind.flash_click()
        await asyncio.sleep(0.12)
        ind.flash_click()
        await asyncio.sleep(0.12)
        # 240ms after the first flash, but only 120ms after the second
        assert ind.click_flash_active
        await asyncio.sleep(0.2)
        assert not ind.click_flash_active

    asyncio.run(scenario())


def test_flash_without_loop_does_not_stick():
    ind = PointerIndicator()
    ind.flash_click()
    assert not ind.click_flash_active


def test_dispose_cancels_pending_revert():
    async def scenario():
        ind = PointerIndicator(flash_ms=1000)
        ind.show(1, 1)
        ind.flash_click()
        ind.dispose()
        assert not ind.visible
        assert not ind.click_flash_active

    asyncio.run(scenario())
